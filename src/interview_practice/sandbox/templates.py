"""Starter code shown in the editor for each language."""

from interview_practice.models.enums import Language

CODE_TEMPLATES: dict[Language, str] = {
    Language.JAVASCRIPT: """function solve(nums, target) {
    // Your code here
}

// Test the function
const nums = [2, 7, 11, 15];
const target = 9;
const result = solve(nums, target);
console.log("Result:", result);""",
    Language.PYTHON: """def solve(nums, target):
    # Your code here
    pass

# Test the function
nums = [2, 7, 11, 15]
target = 9
result = solve(nums, target)
print("Result:", result)""",
    Language.JAVA: """public class Solution {
    public int[] solve(int[] nums, int target) {
        // Your code here
        return new int[]{};
    }

    public static void main(String[] args) {
        Solution sol = new Solution();
        int[] nums = {2, 7, 11, 15};
        int target = 9;
        int[] result = sol.solve(nums, target);
        System.out.println("Result: " + java.util.Arrays.toString(result));
    }
}""",
    Language.CPP: """#include <vector>
#include <iostream>
using namespace std;

class Solution {
public:
    vector<int> solve(vector<int>& nums, int target) {
        // Your code here
        return {};
    }
};

int main() {
    Solution sol;
    vector<int> nums = {2, 7, 11, 15};
    int target = 9;
    vector<int> result = sol.solve(nums, target);
    cout << "Result: ";
    for(int i : result) cout << i << " ";
    cout << endl;
    return 0;
}""",
}


def code_template(language: Language) -> str:
    return CODE_TEMPLATES[language]
